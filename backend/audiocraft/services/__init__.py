# Services package init
"""
AudioCraft Backend: Services Layer
==================================

What:  Business logic between routes (HTTP) and the account store.
How:   Services take the store as an argument, apply business rules, and
       raise audiocraft.exceptions errors. Each module exposes a singleton.

Service Inventory:
    - AuthService:        password hashing, tokens, signup/login/resolve
    - EntitlementService: credit policy and atomic charging
    - FileService:        temporary upload storage and cleanup
    - AudioService:       the enhancement stub workflow
    - PaymentService:     checkout and webhook stubs
"""
