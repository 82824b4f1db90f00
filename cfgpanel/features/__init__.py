"""
Features that register settings groups and consume their values.
"""
