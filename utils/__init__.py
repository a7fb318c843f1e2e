"""
Utils package for common utilities.
"""
