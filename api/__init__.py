"""HTTP route groups"""
