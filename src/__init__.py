"""
Gold-Layer Sales Analytics
"""
