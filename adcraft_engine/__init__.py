"""AdCraft content engine: marketing copy and brand image generation."""
