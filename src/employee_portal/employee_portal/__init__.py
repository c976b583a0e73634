"""Employee Portal package.

This package is organized by feature modules (employees, tasks, attendance,
leaves, ...) with a thin Flask controller layer on top of service/repository
layers, plus a small HTTP client layer (``client``) for consumers of the API.
"""
