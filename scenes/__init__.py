"""scenes package — game scenes and drawing helpers."""
