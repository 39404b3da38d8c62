# Routes package init
"""
MoodLog Backend — API Routes Package
======================================

Route Inventory:
    - accounts.py:  POST /register, POST /login
    - mood.py:      POST /mood, GET /mood/{user_id}
    - journal.py:   GET /jentries, GET /jentry/{entry_id}, POST /jlog
    - gemini.py:    POST /gemini
    - health.py:    GET /health

Routes stay thin: parse the body, call one service, return its result.
Errors are raised by services and rendered by the handlers in main.py.
"""
