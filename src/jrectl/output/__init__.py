"""Output formatting for ServiceResult (rich text or JSON)."""
