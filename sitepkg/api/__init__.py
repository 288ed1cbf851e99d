"""sitepkg API package - user-facing surfaces built on the option layer."""
