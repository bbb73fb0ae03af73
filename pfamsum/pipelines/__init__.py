"""Processing pipelines"""
