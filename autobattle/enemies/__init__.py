"""
Enemy generation: species profiles and the procedural enemy factory.
"""
