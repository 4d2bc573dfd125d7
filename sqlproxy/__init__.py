"""Natural-language to SQL proxy (Gemini -> execution service)."""
