# Force SQLModel table registration at test discovery time
import matchday.models  # noqa: F401
