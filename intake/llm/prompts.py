"""Prompt templates for language model event extraction.

Shared by all completion backends (OpenAI, OpenAI-compatible, Gemini) so
extraction behaves the same regardless of provider.
"""

EVENT_JSON_SCHEMA = """\
{
  "title": "string (the event name/title)",
  "datetime": "ISO 8601 date and time of the start, with timezone offset if known, or null",
  "location": {"name": "string (venue or place name)"} or null,
  "description": "string (short description of the event) or null",
  "category": "social" | "business" | "entertainment"
}"""


SYSTEM_PROMPT = f"""Extract the event details from the text:
- Title
- Date and Time
- Location
- Description
- Category: "social", "business", or "entertainment"

Return ONLY a JSON object matching this schema, with no markdown code blocks or other text:

{EVENT_JSON_SCHEMA}

Use null for any field you cannot determine. If the text describes several events, extract the first one."""
