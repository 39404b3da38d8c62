# Middleware package init
"""
MoodLog Backend — Middleware Package
======================================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    1. Request ID: generate correlation id used by every later log line
    2. Logging: access line with status and duration
    3. CORS: FastAPI's CORSMiddleware (answers preflight OPTIONS)
"""
