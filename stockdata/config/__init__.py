"""
Runtime configuration
"""
