"""Shared configuration and logging for the PAD compiler and its CLI"""
