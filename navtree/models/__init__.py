"""Models package - exports all models for easy importing"""
from navtree.models.menu import Menu, MenuItem
from navtree.models.style import HeaderStyle, FooterStyle
from navtree.models.page import Page
from navtree.models.user import User

__all__ = [
    'Menu',
    'MenuItem',
    'HeaderStyle',
    'FooterStyle',
    'Page',
    'User'
]
