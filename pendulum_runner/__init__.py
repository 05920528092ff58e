"""Pendulum — runs recurring HTTP schedules and records their outcomes."""
