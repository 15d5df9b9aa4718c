from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/', include('spots.urls')),
    path('api/', include('reviews.urls')),
    path('api/', include('user.urls')),
    path('api/recommendations/', include('recommendations.urls')),
]
