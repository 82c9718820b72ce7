def ilike_escape(q: str) -> str:
    """Escape LIKE/ILIKE wildcards in user input and wrap it for a contains match."""
    escaped = q.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"
