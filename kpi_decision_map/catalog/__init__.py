"""
Static catalogs consumed by the engine and the presentation shells.

Modules
-------
options        : Option catalogs with labels and vote vectors; lookups and
                 shell-side id validation.
archetype_meta : Display title, blurb, chips and colour per archetype.
"""
