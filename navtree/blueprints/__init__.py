"""Blueprints"""
