"""HTTP DTOs (pydantic) grouped by bounded context."""
