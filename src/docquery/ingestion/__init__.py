"""Reading files into metadata blocks and content."""
