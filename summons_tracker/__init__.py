"""Summons lifecycle and worklist engine."""
