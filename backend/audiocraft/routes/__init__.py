# Routes package init
"""
AudioCraft Backend: API Routes Package
======================================

Route Inventory:
    - auth.py:      POST /api/auth/signup, POST /api/auth/login, GET /api/auth/verify
    - audio.py:     POST /api/audio/enhance
    - payments.py:  POST /api/payments/create-checkout, POST /api/payments/webhook
    - users.py:     GET  /api/users/profile
    - health.py:    GET  /api/health

Routes stay thin: read the request, call a service, return a schema.
Business logic lives in audiocraft.services.
"""
