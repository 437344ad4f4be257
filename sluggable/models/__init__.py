from sluggable.models.mixin import SluggableMixin
