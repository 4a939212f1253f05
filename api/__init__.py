"""API package - FastAPI application for the OCR service."""
