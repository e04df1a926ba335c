"""simulation — World record, fixed-step driver and deferred effects.

Submodules
----------
world_state     WorldState — everything one running game owns
scheduler       DeferredScheduler — level-tagged timed effects
game            Simulation — facade used by the scenes and tests
"""
