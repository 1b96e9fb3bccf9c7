from models.grade_section import GradeSection
from models.schedule_slot import ScheduleSlot
from models.teacher import Teacher

__all__ = [
	"GradeSection",
	"ScheduleSlot",
	"Teacher",
]
