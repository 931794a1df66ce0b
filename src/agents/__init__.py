"""
Extraction stages for SurveyPulse.

Contains the modules that take report text through the engine:
- Normalizer
- Block Splitter
- Record Parser (with the Comment Validator)
- Comment List Extractor
- Unit Grouping (report payload)
"""
