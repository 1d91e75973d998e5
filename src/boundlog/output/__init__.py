"""Console and table rendering."""
