"""
Services Package

Business logic for the settings service.
"""
