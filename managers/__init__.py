"""Host-side managers for mounted countdowns"""
