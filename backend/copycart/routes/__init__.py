"""
CopyCart Backend — API Routes Package
=======================================

Route Inventory:
    - products.py:  GET  /products, POST /products
    - ai.py:        POST /ai/generate-content, POST /ai/chat
    - health.py:    GET  /health
"""
