"""LiftLog workout tracking API."""
