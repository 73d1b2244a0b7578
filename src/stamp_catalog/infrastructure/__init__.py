"""Infrastructure layer: cleansing framework."""
