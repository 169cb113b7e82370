from __future__ import annotations

from ..types import MaskType, Operation
from .base import TemplateDialect
from .registry import register


class PostgresDialect(TemplateDialect):
    name = "postgres"

    # extract(dow) numbers Sunday as 0 and Saturday as 6
    templates = {
        Operation.FORMAT_DATE: "to_char({column}, '{format}')",
        Operation.GENERATE_DATE_RANGE: (
            "generate_series(\n"
            "    {start_date}::date,\n"
            "    {end_date}::date,\n"
            "    '1 {interval}'::interval\n"
            ") as date_range"
        ),
        Operation.BUSINESS_DAY_CHECK: "extract(dow from {column}) not in (0, 6)",
        Operation.FISCAL_YEAR_START: (
            "case\n"
            "    when extract(month from {column}) >= {start_month}\n"
            "    then date_trunc('year', {column} + interval '{lead_months} months')\n"
            "    else date_trunc('year', {column} - interval '{lag_months} months')\n"
            "end"
        ),
        Operation.CLEAN_STRING: r"trim(regexp_replace({column}, '\s+', ' ', 'g'))",
        Operation.EXTRACT_EMAIL_DOMAIN: "split_part({column}, '@', 2)",
        Operation.VALIDATE_EMAIL: r"{column} ~* '^[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{{2,}}$'",
        Operation.GENERATE_SLUG: (
            r"lower(regexp_replace(regexp_replace({column}, '[^a-zA-Z0-9\s-]', '', 'g'), '\s+', '-', 'g'))"
        ),
    }

    mask_templates = {
        MaskType.EMAIL: (
            r"regexp_replace({column}, '([a-zA-Z0-9._%+-]+)@([a-zA-Z0-9.-]+\.[a-zA-Z]{{2,}})', '***@\2')"
        ),
        MaskType.PHONE: r"regexp_replace({column}, '(\d{{3}})(\d{{3}})(\d{{4}})', '***-***-\3')",
    }


register(PostgresDialect())
