# Services package init
"""
MoodLog Backend — Services Layer
==================================

Service Inventory:
    - DocumentStore (abstract): append / get / query / server timestamp
        - FirestoreStore: Google Cloud Firestore
        - InMemoryStore: process-local, for development and tests
    - IdentityProvider (abstract): create account / verify credentials
        - FirebaseIdentityProvider: Firebase Auth Identity Toolkit REST API
    - AccountService: /register and /login
    - MoodService: mood log and latest-mood lookup
    - JournalService: journal list / detail / append
    - GeminiService: single-turn Gemini proxy

Services receive their providers through their constructors; the
composition root in app.dependencies wires them together.
"""
