"""Candidate configuration file discovery."""
