"""
Services layer - Business logic goes here.
Keep services focused on one pipeline stage each (moderation, routing, etc.)

DESIGN PRINCIPLE:
- Services contain business logic, NOT routes
- complaint_intake.py is the only place that sequences the stages
- Providers (vision, geocoding, mail) degrade instead of raising
"""
