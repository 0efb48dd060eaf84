"""Garden Management - Root Package.

This package manages gardens and the plants they contain. A garden is an
aggregate root: every change to the garden or to one of its plants goes
through the garden, which enforces the surface-area capacity and humidity
rules and records a domain event for each accepted change.

Key Components:
    - domain: Garden aggregate, value objects, domain events and contracts
    - application: Use cases orchestrating load, mutate, commit and publish
    - infrastructure: Persistence, messaging, logging
    - config: Typed configuration loading
"""

__version__ = "1.0.0"
__package_name__ = "garden-management"
