"""Async client for uploading media to the POAP Moments service and creating moments."""
