"""Terminal, JSON and pager output."""
