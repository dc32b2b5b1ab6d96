# Utility modules for the meal planner
from .url_validator import is_safe_url, safe_fetch, extract_url, SSRFError
from .json_fields import parse_or_default, dump_field
from .sanitizer import (
    sanitize_text, sanitize_url, sanitize_recipe_name,
    sanitize_instructions, strip_html
)
