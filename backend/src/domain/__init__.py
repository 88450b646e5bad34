"""Domain layer: extraction models and rental agreement templates."""
