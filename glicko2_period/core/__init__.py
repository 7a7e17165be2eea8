"""Core value types, the rating system interface, and exceptions"""
