"""
models/ - Domain Layer
=======================
Plain dataclasses for briefs, submissions, feedback, influencer
applications and users. No database or HTTP code lives here.
"""
