# Routes package init
"""
Idea Box API: Routes Package
============================

Route Inventory:
    - boxes.py:   GET/POST /boxes, GET/PUT/DELETE /boxes/{box_id}
    - ideas.py:   GET/POST /boxes/{box_id}/ideas,
                  GET/PUT/DELETE /boxes/{box_id}/ideas/{idea_id}
    - health.py:  GET /health

Routes are thin: extract path/body, call the service, pick the status code.
Errors are raised as exceptions and formatted by the handlers in main.py.
"""
