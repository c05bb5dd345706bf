"""Program identification tables."""
