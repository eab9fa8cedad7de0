"""
Safety-Aware Routing REST API.
"""
