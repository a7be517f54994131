# core/resources.py

import logging

from django.db.models import F

from .api import ApiView, api_response, clean_form, remap
from .exceptions import NotFound

logger = logging.getLogger(__name__)


class ResourceMixin:
    """
    Shared configuration for the flat record stores (patients, rooms, ...).

    `columns` maps output keys to queryset lookups (or expressions) and
    `aliases` maps request keys to model field names.
    """
    model = None
    form_class = None
    aliases = {}
    columns = {}
    noun = 'Record'

    def get_queryset(self):
        return self.model.objects.all()

    def rows(self, queryset):
        expressions = {
            key: F(lookup) if isinstance(lookup, str) else lookup
            for key, lookup in self.columns.items()
        }
        return list(queryset.values(**expressions))

    def bind_form(self, request, instance=None):
        return self.form_class(remap(request.data, self.aliases), instance=instance)


class ResourceListView(ResourceMixin, ApiView):
    ordering = ('-pk',)
    id_key = 'id'

    def get(self, request):
        return api_response(data=self.rows(self.get_queryset().order_by(*self.ordering)))

    def post(self, request):
        form = self.bind_form(request)
        clean_form(form, self.aliases)
        instance = form.save()
        logger.info("%s %s created", self.noun, instance.pk)
        return self.created_response(instance)

    def created_response(self, instance):
        return api_response(
            message=f'{self.noun} added successfully',
            status=201,
            **{self.id_key: instance.pk}
        )


class ResourceDetailView(ResourceMixin, ApiView):

    def get_object(self, pk):
        try:
            return self.model.objects.get(pk=pk)
        except self.model.DoesNotExist:
            raise NotFound(f'{self.noun} not found')

    def get(self, request, pk):
        rows = self.rows(self.get_queryset().filter(pk=pk))
        if not rows:
            raise NotFound(f'{self.noun} not found')
        return api_response(data=rows[0])

    def put(self, request, pk):
        form = self.bind_form(request, instance=self.get_object(pk))
        clean_form(form, self.aliases)
        form.save()
        return api_response(message=f'{self.noun} updated successfully')

    def delete(self, request, pk):
        deleted, __ = self.model.objects.filter(pk=pk).delete()
        if not deleted:
            raise NotFound(f'{self.noun} not found')
        logger.info("%s %s deleted", self.noun, pk)
        return api_response(message=f'{self.noun} deleted successfully')
