"""Residence rules engine.

Organized by feature modules (attendance, permissions, notifications,
clearance) with service/repository layers and a small scheduler on top.
"""
