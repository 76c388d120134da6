"""PDF generation: themes, shared render resources, the builder and renderer."""
