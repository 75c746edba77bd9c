"""
CopyCart Backend — Services Layer
===================================

Service Inventory:
    - ProductService: create and list products
    - HuggingFaceService: raw client for the text-generation endpoint
    - MarketingService: content generation and marketing chat
    - extraction: pure helpers that parse model output
"""
