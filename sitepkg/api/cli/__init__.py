"""sitepkg command-line support: output, usage display and the sitepkg utility."""

# No eager imports: sitepkg.site imports usage from here while it initializes.
