# Services package init
"""
Catalog Backend - Services Layer
==================================

What:  Business logic between routes (HTTP) and the database/queue/filesystem.

Service Inventory:
    - TagService: query parsing, filtered/paginated tag listing, response assembly
    - TranslationService: language → bundle resolution, bundle loading, enrichment
    - PlanService: active plan listing and tier lookup
    - QueueManager: Redis-backed job producer, queue statistics and health probe

Each module exposes a stateless singleton (`tag_service`, `plan_service`, ...)
that routes import; tests patch those names or build fresh instances.
"""
