"""pfamsum test suite"""
