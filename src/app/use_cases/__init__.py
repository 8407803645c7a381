"""
Use Cases

- auth/: Session credential exchange, rotation and logout
"""
