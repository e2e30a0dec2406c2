"""API request models"""
