# GymCRM models - one module per domain
from gymcrm.models.userModel import User
from gymcrm.models.sessionModel import Session
from gymcrm.models.gymModel import Gym, SubscriptionPlan
from gymcrm.models.customerModel import Customer
from gymcrm.models.financeModel import Invoice, Transaction
from gymcrm.models.bookingModel import Booking
from gymcrm.models.notificationModel import Notification, NotificationRead
from gymcrm.models.trainingModel import WorkoutPlan, AssignedWorkoutPlan, NutritionPlan
from gymcrm.models.staffModel import Staff
from gymcrm.models.attendanceModel import Attendance
from gymcrm.models.contactModel import ContactMessage
from gymcrm.models.personalTrainingModel import PersonalTrainingAssignment, MembershipPlan

__all__ = [
    "User", "Session",
    "Gym", "SubscriptionPlan",
    "Customer",
    "Invoice", "Transaction",
    "Booking",
    "Notification", "NotificationRead",
    "WorkoutPlan", "AssignedWorkoutPlan", "NutritionPlan",
    "Staff",
    "Attendance",
    "ContactMessage",
    "PersonalTrainingAssignment", "MembershipPlan",
]
