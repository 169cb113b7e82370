from __future__ import annotations

from ..types import MaskType, Operation
from .base import TemplateDialect
from .registry import register


class BigQueryDialect(TemplateDialect):
    name = "bigquery"

    def quote_ident(self, ident: str) -> str:
        # BigQuery quotes the whole dotted path with backticks
        return f"`{ident}`"

    templates = {
        Operation.FORMAT_DATE: "format_date('{format}', {column})",
        Operation.GENERATE_DATE_RANGE: (
            "generate_date_array(\n"
            "    {start_date},\n"
            "    {end_date},\n"
            "    interval 1 {interval}\n"
            ") as date_range"
        ),
        Operation.BUSINESS_DAY_CHECK: "extract(dayofweek from {column}) not in (1, 7)",
        Operation.FISCAL_YEAR_START: (
            "case\n"
            "    when extract(month from {column}) >= {start_month}\n"
            "    then date_trunc(date_add({column}, interval {lead_months} month), year)\n"
            "    else date_trunc(date_sub({column}, interval {lag_months} month), year)\n"
            "end"
        ),
        Operation.CLEAN_STRING: r"trim(regexp_replace({column}, r'\s+', ' '))",
        Operation.EXTRACT_EMAIL_DOMAIN: "split({column}, '@')[offset(1)]",
        Operation.VALIDATE_EMAIL: (
            r"regexp_contains({column}, r'^[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{{2,}}$')"
        ),
        Operation.GENERATE_SLUG: (
            r"lower(regexp_replace(regexp_replace({column}, r'[^a-zA-Z0-9\s-]', ''), r'\s+', '-'))"
        ),
    }

    mask_templates = {
        MaskType.EMAIL: (
            r"regexp_replace({column}, r'([a-zA-Z0-9._%+-]+)@([a-zA-Z0-9.-]+\.[a-zA-Z]{{2,}})', '***@\\2')"
        ),
        MaskType.PHONE: r"regexp_replace({column}, r'(\d{{3}})(\d{{3}})(\d{{4}})', '***-***-\\3')",
    }


register(BigQueryDialect())
