# ABOUTME: notion-publish converts Notion blog and diary entries to Markdown.
# ABOUTME: Output files carry fixed-shape frontmatter for a static-site generator.

__version__ = "0.1.0"
