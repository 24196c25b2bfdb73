"""Infrastructure layer: conversions to and from external toolkits."""
