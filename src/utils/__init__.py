"""
Utility modules for SurveyPulse.

Cross-cutting concerns:
- Storage: File I/O helpers for page text input and extraction outputs
"""
