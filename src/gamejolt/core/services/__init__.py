"""Servicios: sesión verificada, data-store y la fachada del cliente."""
