# Routes package init
"""
Catalog Backend - API Routes Package
======================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - tags.py:    GET  /api/v1/tags               (filtered, paginated, optionally translated)
    - plans.py:   GET  /api/v1/plans              (active plans, cheapest first)
                  GET  /api/v1/plans/{tier}       (single plan by tier)
    - queues.py:  POST /api/v1/queues/test        (enqueue a test job)
                  GET  /api/v1/queues/stats       (job counts per queue)
                  GET  /api/v1/queues/health      (queue backend probe)
    - health.py:  GET  /health                    (service health check)

Routes stay thin: extract request data, call the service, pick the status
code. Errors are raised as application exceptions and formatted by the
global handlers in main.py.
"""
