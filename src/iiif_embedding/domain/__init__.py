"""Domain layer: vocabulary, codec and value models."""
