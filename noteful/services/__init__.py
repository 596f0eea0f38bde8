"""
Noteful Backend — Services Layer
=================================

What:  Data access between routes (HTTP) and the database (persistence).

Service Inventory:
    - TableRepository: generic list/insert/get/delete/update over one table
    - folder_repository, note_repository: the two configured instances

Every repository method takes the AsyncSession as its first argument, so
routes decide which session is used and tests can pass a mock.
"""
