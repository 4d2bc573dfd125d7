# sqlproxy/prompt.py

SCHEMA_TEXT = (
    "shipments(id BIGINT, supplier TEXT, country TEXT, quantity INT, "
    "dispatched_at DATE, image_url TEXT)"
)

PROMPT_TEMPLATE = """You are an expert Postgres SQL generator.
Schema: {schema_text}.
Today is {reference_date}.
• Convert fuzzy/relative dates ("Feb 1", "last week", "between Feb 1 and Mar 15") to explicit dates (YYYY‑MM‑DD).
• Country filters must be case‑insensitive: LOWER(country) = LOWER('us') or country ILIKE '%fr%'. Treat "US", "USA", "United States" as equal.
• Unless the user explicitly requests ALL rows or gives a LIMIT, append LIMIT 200.
• Return exactly ONE plain SELECT statement – no comments, no back‑ticks, no explanation.

User request: {user_request}"""


def build_prompt(user_request: str, reference_date: str) -> str:
    """
    Compose the single-table prompt sent to every model.
    The wording is fixed; only the date and the user's request vary.
    """
    return PROMPT_TEMPLATE.format(
        schema_text=SCHEMA_TEXT,
        reference_date=reference_date,
        user_request=user_request,
    )
