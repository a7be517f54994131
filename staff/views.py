# staff/views.py

from core.resources import ResourceDetailView, ResourceListView
from .forms import DoctorForm, RoleForm, SpecializationForm, StaffMemberForm
from .models import Doctor, Role, Specialization, StaffMember


# ================= ROLES ====================

class RoleResourceMixin:
    model = Role
    form_class = RoleForm
    noun = 'Role'
    aliases = {'roleName': 'name', 'roleDescription': 'description'}
    columns = {
        'ROLE_ID': 'pk',
        'ROLE_NAME': 'name',
        'ROLE_DESCRIPTION': 'description',
    }


class RoleListView(RoleResourceMixin, ResourceListView):
    id_key = 'roleId'


class RoleDetailView(RoleResourceMixin, ResourceDetailView):
    pass


# ================= STAFF ====================

class StaffResourceMixin:
    model = StaffMember
    form_class = StaffMemberForm
    noun = 'Staff member'
    aliases = {
        'firstName': 'first_name',
        'lastName': 'last_name',
        'roleId': 'role',
        'phoneNum': 'contact_number',
        'hireDate': 'hire_date',
    }
    columns = {
        'STAFF_ID': 'pk',
        'FIRST_NAME': 'first_name',
        'LAST_NAME': 'last_name',
        'ROLE_ID': 'role_id',
        'ROLE_NAME': 'role__name',
        'PHONE_NUM': 'contact_number',
        'EMAIL': 'email',
        'HIRE_DATE': 'hire_date',
        'SHIFT': 'shift',
    }


class StaffListView(StaffResourceMixin, ResourceListView):
    id_key = 'staffId'


class StaffDetailView(StaffResourceMixin, ResourceDetailView):
    pass


# ================= SPECIALIZATIONS ====================

class SpecializationResourceMixin:
    model = Specialization
    form_class = SpecializationForm
    noun = 'Specialization'
    columns = {
        'ID': 'pk',
        'NAME': 'name',
        'DESCRIPTION': 'description',
    }


class SpecializationListView(SpecializationResourceMixin, ResourceListView):
    ordering = ('name',)
    id_key = 'specializationId'


class SpecializationDetailView(SpecializationResourceMixin, ResourceDetailView):
    pass


# ================= DOCTORS ====================

class DoctorResourceMixin:
    model = Doctor
    form_class = DoctorForm
    noun = 'Doctor'
    aliases = {
        'firstName': 'first_name',
        'lastName': 'last_name',
        'phone': 'contact_number',
        'licenseNumber': 'license_number',
    }
    columns = {
        'DOCTOR_ID': 'pk',
        'FIRST_NAME': 'first_name',
        'LAST_NAME': 'last_name',
        'SPECIALIZATION_ID': 'specialization_id',
        'SPECIALIZATION': 'specialization__name',
        'EMAIL': 'email',
        'PHONE': 'contact_number',
        'LICENSE_NUMBER': 'license_number',
        'STATUS': 'status',
    }


class DoctorListView(DoctorResourceMixin, ResourceListView):
    id_key = 'doctorId'


class DoctorDetailView(DoctorResourceMixin, ResourceDetailView):
    pass
