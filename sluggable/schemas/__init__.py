from sluggable.schemas.binding import SlugBinding
