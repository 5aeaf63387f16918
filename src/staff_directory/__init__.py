"""Staff Directory package.

Employee records with sign-up/sign-in, role changes and partial updates,
organized as a users feature module with a thin Flask controller layer over
service/repository layers backed by a JSON document store.
"""
