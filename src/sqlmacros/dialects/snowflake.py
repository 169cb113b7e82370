from __future__ import annotations

from ..types import MaskType, Operation
from .base import TemplateDialect
from .registry import register


class SnowflakeDialect(TemplateDialect):
    name = "snowflake"

    # Snowflake string literals consume one level of backslashes, hence \\s and \\d
    templates = {
        Operation.FORMAT_DATE: "to_varchar({column}, '{format}')",
        Operation.GENERATE_DATE_RANGE: (
            "date_range(\n"
            "    {start_date},\n"
            "    {end_date},\n"
            "    '{interval}'\n"
            ") as date_range"
        ),
        Operation.BUSINESS_DAY_CHECK: "dayofweek(try_cast({column} as date)) not in (1, 7)",
        Operation.FISCAL_YEAR_START: (
            "case\n"
            "    when month({column}) >= {start_month}\n"
            "    then date_trunc('year', dateadd(month, {lead_months}, {column}))\n"
            "    else date_trunc('year', dateadd(month, -{lag_months}, {column}))\n"
            "end"
        ),
        Operation.CLEAN_STRING: r"trim(regexp_replace({column}, '\\s+', ' '))",
        Operation.EXTRACT_EMAIL_DOMAIN: "split_part({column}, '@', 2)",
        Operation.VALIDATE_EMAIL: (
            r"regexp_like({column}, '^[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\\.[A-Za-z]{{2,}}$')"
        ),
        Operation.GENERATE_SLUG: (
            r"lower(regexp_replace(regexp_replace({column}, '[^a-zA-Z0-9\\s-]', ''), '\\s+', '-'))"
        ),
    }

    mask_templates = {
        MaskType.EMAIL: (
            r"regexp_replace({column}, '([a-zA-Z0-9._%+-]+)@([a-zA-Z0-9.-]+\\.[a-zA-Z]{{2,}})', '***@\\2')"
        ),
        MaskType.PHONE: r"regexp_replace({column}, '(\\d{{3}})(\\d{{3}})(\\d{{4}})', '***-***-\\3')",
    }


register(SnowflakeDialect())
