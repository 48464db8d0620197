"""Service layer for the menu engine"""
