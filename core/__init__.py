"""KDP Book Formatter core: template-driven formatting and rendering."""
