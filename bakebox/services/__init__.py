"""
Bakebox Services.

Business logic that doesn't belong in models:
- scaling: yield/mold factors and per-section baker's percentages (pure)
- backup: JSON export/import of the whole box
- images: recipe photo generation/editing through the image backend

Import the submodules directly; models import ``scaling`` at load time,
so this package must stay free of model imports.
"""
