def gemini_text(text) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def gemini_error(code: int, message: str = "boom") -> dict:
    return {"error": {"code": code, "message": message}}
