# Services package init
"""
RecipeShare Backend - Services Layer (Query Executors)
======================================================

What:  One executor class per entity, sitting between routes (HTTP) and the
       database (persistence).
How:   Each method takes the Database handle, issues one parameterized
       statement (or one transaction) and returns records, an ID or a row
       count. Failures surface as typed exceptions from recipeshare.exceptions.

Service Inventory:
    - RecipeService:   recipes, cuisine lookup, create/update/cascading delete
    - StepService:     numbered instructions, atomic batch insert
    - ImageService:    recipe images
    - LikeService:     likes, liked-by-user, liked-by-all
    - UserService:     users with computed rank, user creation
    - PantryService:   saved pantries per user
    - LocationService: location lookup
"""
