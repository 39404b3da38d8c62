"""
MoodLog Backend — Application Package
=======================================

HTTP gateway for the MoodLog mobile app: accounts (Firebase Authentication),
mood and journal storage (Firestore), and a Gemini proxy.

Layers:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │  Services (Accessors / Gateways)    │  ← validation, error mapping
    ├─────────────────────────────────────┤
    │  Provider interfaces                │  ← DocumentStore, IdentityProvider
    ├─────────────────────────────────────┤
    │  Backends                           │  ← Firestore, Firebase Auth REST,
    │                                     │    in-memory store
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
