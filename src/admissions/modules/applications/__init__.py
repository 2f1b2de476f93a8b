"""
Applications Module

Course applications: drafts, submission with documents, and the status
lifecycle reviewed by verification officers.
"""
