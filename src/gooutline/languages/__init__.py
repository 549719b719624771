"""Language-specific declaration extractors."""
