"""Document resolution and the query pipeline."""
