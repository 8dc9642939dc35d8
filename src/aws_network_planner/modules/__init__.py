"""AWS discovery and display modules"""
