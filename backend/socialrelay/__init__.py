"""
SocialRelay - OAuth relay and caption generation backend
"""
