"""
インターフェース層。
"""
