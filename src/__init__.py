"""
Order Analytics Engine
"""
