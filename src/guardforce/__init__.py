"""Guard workforce management package.

Organized by feature modules (sites, guards, shifts, attendance, invoices, ...)
with a thin Flask controller layer over service/repository layers.
"""
