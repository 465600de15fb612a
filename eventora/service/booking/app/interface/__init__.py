"""Booking ports"""
