# sqlproxy/validate.py
import re

ALL_ROWS_RE = re.compile(r"all\s+rows", re.IGNORECASE)
LENGTH_OVERRIDE_RE = re.compile(r"all\s+rows|limit\s+\d+", re.IGNORECASE)
LIMIT_RE = re.compile(r"\blimit\b", re.IGNORECASE)

# first SELECT up to the first terminator (or end of text)
FIRST_SELECT_RE = re.compile(r"select[\s\S]*?(?=;|\Z)", re.IGNORECASE)


def strip_code_fences(text: str) -> str:
    return text.replace("```", "").strip()


def extract_sql(text: str) -> str | None:
    """
    Pulls the first SELECT statement out of raw model output.
    Code fences are removed and anything after the first ';' is dropped.
    Returns None when the text holds no SELECT at all.
    """
    m = FIRST_SELECT_RE.search(strip_code_fences(text or ""))
    if not m:
        return None
    return m.group(0).strip()


def wants_all_rows(prompt: str) -> bool:
    return bool(ALL_ROWS_RE.search(prompt))


def overrides_length_limit(prompt: str) -> bool:
    return bool(LENGTH_OVERRIDE_RE.search(prompt))


def prompt_too_long(prompt: str, max_chars: int) -> bool:
    """Length gate; prompts asking for all rows or an explicit limit are let through."""
    return len(prompt) > max_chars and not overrides_length_limit(prompt)


def ensure_limit(sql: str, prompt: str, default_limit: int) -> str:
    # Safety: add LIMIT if missing and the user did not ask for everything
    if LIMIT_RE.search(sql) or wants_all_rows(prompt):
        return sql
    return f"{sql} LIMIT {default_limit}"


def is_select(sql: str) -> bool:
    return sql.lower().startswith("select")
