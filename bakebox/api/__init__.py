"""
Bakebox REST API.

Provides DRF ViewSets for:
- Recipe (full CRUD + scale, logs, move-section, images, history)
- Category (full CRUD + move)
- Knowledge, Resource (full CRUD)
- Backup export/import and mold presets
"""
