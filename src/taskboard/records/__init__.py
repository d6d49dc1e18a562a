"""
Generic record layer.

Components:
- models.py: Record base type, id / timestamp / value coercion
- store.py: RecordStore, the in-memory ordered collection per entity
- service.py: ReadOnlyService / CrudService over a RecordStore
- fixtures.py: JSON seed loading
- errors.py: RecordStoreError, FixtureError
"""
