"""
Adapters: command line interface and configuration loading
"""
