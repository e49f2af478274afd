"""
Content migrations: JSON seed and Sanity import scripts
"""
