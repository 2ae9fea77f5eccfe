"""
Service layer.

Each service encapsulates the business logic of one domain and opens
its own ``transaction()``; routers only translate HTTP to service calls.
"""
