"""
Livraria: book and user CRUD API with bearer-token authentication.
"""
