# Services package init
"""
Idea Box API: Services Layer
============================

What:  Business logic sitting between routes (HTTP) and the database.
How:   Services receive an AsyncSession per call, perform the parent-box and
       scoped-idea lookups, and return response schemas.

Service Inventory:
    - StorageService (base): shared box/idea lookups and storage error wrapping
    - BoxService: list/get/create/update/delete boxes
    - IdeaService: list/get/create/update/delete ideas within a box
"""
