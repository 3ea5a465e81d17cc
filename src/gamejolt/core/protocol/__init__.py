"""Protocolo de cable del servicio: firma, requests y gramáticas de respuesta."""
