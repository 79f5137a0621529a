"""Schemas - Pydantic shapes for stored documents and API payloads."""
