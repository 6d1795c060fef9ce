"""Infrastructure layer - logging shared by all fogmap components."""
