"""Weighbridge weighing and trip settlement service."""
