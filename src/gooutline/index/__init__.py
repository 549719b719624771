"""Go syntax tree provider."""
